"""
Sophia Recruit module
"""
