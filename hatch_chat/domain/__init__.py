"""
DOMAIN LAYER - Conversation routing rules

This layer contains:
- Entities: Project, Team, Agent, Conversation, Message
- Value Objects: canonical conversation identifiers, message ids
- Services: pure routing logic (team lead, speaking authority, availability,
  invariant assertions)
- Ports: interfaces that infrastructure implements
- Exceptions: domain-specific errors

RULES:
1. NO framework imports (no FastAPI, Pydantic, OpenAI, etc.)
2. NO I/O operations (no database, no HTTP, no file system)
3. Only depends on Python stdlib
"""
