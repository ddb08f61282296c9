"""Rich renderers for the todo app panels."""
