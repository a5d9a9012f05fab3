"""API module for Surveybot.

API layer boundary:
- Validates inputs, reads/writes DB through the service layer
- Returns JSON payloads (and CSV exports) for the dashboard and survey pages
- Forbidden: statistics computed outside surveybot.aggregation
"""
