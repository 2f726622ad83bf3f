"""Icon discovery, probing and resolution"""
