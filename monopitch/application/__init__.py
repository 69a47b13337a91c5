"""
Aplikační vrstva - služby orchestrující doménu.
"""
