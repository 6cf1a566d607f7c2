# src/commands/base/__init__.py

"""
Built-in console commands.

One command per module. commands.loader discovers every CommandImplBase
subclass here, so adding a module is enough to add a command; `reload
commands` re-imports them all.
"""
