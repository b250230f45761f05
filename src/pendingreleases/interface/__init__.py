"""
Interface layer package.

Typer command line, product selection menu and the text table renderer.
"""
