"""
Tool side of the LTI 1.3 Dynamic Registration flow.
"""
__version__ = '1.0.0'
