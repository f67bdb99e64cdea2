"""Core application for the smart inbox.

This package contains the request store, the display logic, the API
client and the views and routes serving the inbox API.
"""
