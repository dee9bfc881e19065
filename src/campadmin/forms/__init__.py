"""Form state and payload mapping"""
