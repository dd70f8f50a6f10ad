"""Built-in CLI sub-commands for specdocs.

This package groups the Typer sub-applications that form the CLI's
top-level command tree:

* :mod:`~specdocs.commands.print` -- render documentation fragments
  (fields, schemas, definitions, operations, tables, whole pages).
* :mod:`~specdocs.commands.inspect` -- list the schemas, operations and
  tags of a spec as tables.
* :mod:`~specdocs.commands.config` -- view and initialise configuration.
"""
