"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus) + display formatting
- task_store.py: JSON-file journal: decode, load, positional mutation, rewrite
"""
