"""Library layer: argument schema, dispatcher, collaborator backend, config."""
