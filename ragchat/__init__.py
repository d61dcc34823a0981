"""
ragchat: retrieval-augmented chat backend.

Document upload with vision-based text extraction, Pinecone retrieval and
OpenAI/OpenRouter chat completion.
"""
