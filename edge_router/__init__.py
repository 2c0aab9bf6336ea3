"""Edge Router: public entry point routing to the API service, static assets or the render service"""
