"""
pakscript core: lexer, parser, IR and compiler for event scripts.
"""
