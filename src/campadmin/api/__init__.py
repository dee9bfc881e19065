"""HTTP surface of the admin service"""
