"""
Boundary layer.

Adapters for external systems: Pinecone (vdb) and chat completion
providers (llm).
"""
