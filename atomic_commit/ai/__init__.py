"""
Text generation backends used to draft commit plans.
"""
