"""
Shared Kernel

Value objects, domain errors, the unit of work and the event bus used by
the booking, payment and review apps.
"""
