"""
PORTS - Interfaces that infrastructure implements

A "port" is an abstract interface that defines WHAT the domain needs,
without specifying HOW it's done.

Subfolders:
- repositories/      → Data persistence interfaces
- reply_generator.py → Text-generation backend interface
"""
