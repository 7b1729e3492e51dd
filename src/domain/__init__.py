"""
Domain layer for purchase fulfillment business logic.

This layer contains:
- Data models (request, session projection, signed link, email, response)
- Capability protocols for the three upstream APIs
- The fulfillment pipeline (verify -> sign -> send)
"""
