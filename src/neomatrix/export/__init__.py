"""
Exporters - embedded source generation and GIF rendering
"""
