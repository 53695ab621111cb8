"""Server Roster."""

from stomp_engine.application.roster.server_roster import ServerRoster

__all__ = ["ServerRoster"]
