"""
Api module
"""
