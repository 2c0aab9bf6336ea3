"""Render Service: composes an HTML fragment from the API service's records"""
