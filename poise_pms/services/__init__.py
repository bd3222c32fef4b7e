"""Project and people services used by the menu."""
