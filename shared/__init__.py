"""
Shared Kernel

Domain errors, value objects, events, the unit of work and the message
bus used by every app of the hotel booking service.
"""
