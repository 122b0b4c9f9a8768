"""Core definitions shared across leafwater: errors, constants, types and configuration."""
