"""
CLI commands for topolens.
"""
