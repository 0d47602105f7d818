"""Bookings app package.

This app holds the stays registered by guests and managed by hosts.
Date logic (conflicts with same-day turnover allowed, next free start
dates, month calendar lanes) lives in the framework-free
``apps.bookings.domain`` package; models, serializers and views only
load snapshots and persist validated changes.
"""
