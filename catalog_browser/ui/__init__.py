"""
Dash adapter: layout builders and callbacks that turn component events
into BrowserSession events.
"""
