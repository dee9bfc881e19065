"""Admin actions built on the API client"""
