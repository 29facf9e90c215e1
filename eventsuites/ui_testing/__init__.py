"""
Event Manager UI testing: framework, page objects, flows and scenarios.
"""
