"""Configuration for the MT942 parser."""
