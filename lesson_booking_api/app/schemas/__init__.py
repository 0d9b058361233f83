"""
Pydantic schema definitions for API payloads.

Each domain (lessons, orders) defines its own Pydantic models for
request and response bodies.  Schemas are separated from the storage
layer to decouple API representation from persistence.
"""
