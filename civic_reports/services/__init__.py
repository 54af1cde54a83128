"""
Services layer - report lifecycle, durable store and optional AI assistance.

DESIGN PRINCIPLE:
- Services contain business logic, NOT routes
- Every report mutation goes through ReportLifecycle
- AI suggestions are advisory only and never change stored reports
"""
