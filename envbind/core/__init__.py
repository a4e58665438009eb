"""
Core building blocks shared across envbind: enums and exceptions.
"""
