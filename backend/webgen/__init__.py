"""
AI Web Builder backend.

Turns a natural-language application description into a
{frontend, backend, database} code bundle via a chat-completion model.
"""
