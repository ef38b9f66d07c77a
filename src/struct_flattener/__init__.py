"""Struct-schema expander resolving flatten markers into flat field lists."""
