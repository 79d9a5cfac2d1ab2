"""Interactive console front end: menu loop and rich rendering."""
