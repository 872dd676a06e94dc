"""
Shared Kernel

Base domain classes, value objects and the transactional plumbing (unit of
work, message bus) used by the slot and booking apps.
"""
