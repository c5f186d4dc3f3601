"""
Plugin License Service Django project.
"""
