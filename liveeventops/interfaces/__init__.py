"""
LiveEventOps - Interfaces Package
=================================

Contains all user-facing interfaces (presentation layer).

Structure:
- cli/: `leo` command-line interface with Rich UI
"""
