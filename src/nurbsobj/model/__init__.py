"""
The MODEL layer contains pure data structures.
It has NO knowledge of the file format; it deals with records, entities and errors.
"""
