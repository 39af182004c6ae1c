"""Messaging module for outbound user notifications.

Email is the only channel; see src.messaging.email.
"""
