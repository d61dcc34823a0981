"""
API request/response models.

Dependencies: pydantic
System role: HTTP API contracts
"""
