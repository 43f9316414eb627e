"""
Task subsystem.

Components:
- task_models.py: data structures (User, Task, TaskStatus, TaskSnapshot)
- task_store.py: in-memory, lock-guarded storage + query/update helpers
- task_observer.py: periodic reporter of task state (thread or coroutine)
- task_api.py: statistics, status shortcuts and summary text
"""
