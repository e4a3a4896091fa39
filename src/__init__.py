"""
Classbank - Classroom Play-Money Banking Service

A FastAPI-based service that moves play money between student accounts,
issues and collects classroom loans, and keeps a credit score per student.
"""

__version__ = "0.1.0"
