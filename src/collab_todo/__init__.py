"""
collab_todo: in-memory users/tasks registry with a background task observer.
"""
