"""Database persistence for groups, time windows and memberships."""
