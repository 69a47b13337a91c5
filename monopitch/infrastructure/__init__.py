"""
Infrastruktura - adaptéry na audio knihovny.
"""
