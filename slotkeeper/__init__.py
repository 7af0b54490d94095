"""Slotkeeper - appointment slot booking API."""
