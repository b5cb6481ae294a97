"""
Test suite for tsactl - tinySA command line tool.
"""
