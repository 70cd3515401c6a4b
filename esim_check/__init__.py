"""eSIM Check — does device X support eSIM?"""
