"""
Doménová vrstva - modely, interfaces a výjimky.
"""
