"""
Shared Kernel

This module contains base classes and utilities shared across the rental
contexts (properties, bookings, reviews, favorites).
"""
