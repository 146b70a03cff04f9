"""
Reference tables bundled with the package
"""
