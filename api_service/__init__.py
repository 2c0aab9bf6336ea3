"""API Service: serves the fixed record list as JSON"""
