"""Personalised fasting and workout cycle engine."""
