"""User-facing interfaces for twitchmotes."""
