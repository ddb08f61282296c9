"""Interactive terminal front end for todo-keeper."""
