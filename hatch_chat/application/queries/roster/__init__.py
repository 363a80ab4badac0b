from .list_agents import ListAgentsHandler, ListAgentsQuery

__all__ = ["ListAgentsQuery", "ListAgentsHandler"]
