"""Built-in plugins shipped with tcmctl."""
