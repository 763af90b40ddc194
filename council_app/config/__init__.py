"""
Configuration module.

Defaults, YAML loading with layered precedence, and validation.
"""
