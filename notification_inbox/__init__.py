"""Notification inbox package initializer.

Stores incoming push messages locally and exposes them to a UI layer.
"""
