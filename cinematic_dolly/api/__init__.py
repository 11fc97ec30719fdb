"""HTTP/WebSocket presentation layer"""
