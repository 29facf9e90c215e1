"""
Event Manager Autotest Test Suites
"""
