"""
Task subsystem.

Components:
- task_models.py: data structures (TrackedTask, TaskResult, TaskOutcome)
- gate.py: admission gate bounding how many task bodies run at once
- task_registry.py: in-flight task set with lookup by name
- task_scheduler.py: BackgroundScheduler (submit / wait / cancel / shutdown)
- errors.py: scheduler exceptions
"""
