"""Floating point calculator with variables.

Basic program flow, for every line of input:
    1. Lexical analysis: a TokenStream hands out tokens of the line one at a time, with one token of putback
        - See calculator/lang/lexical.py
    2. Evaluation: recursive descent over the tokens, one function per grammar rule, computing values as it parses
        - See calculator/lang/evaluator.py for the grammar
    3. Variables: 'let' declarations are stored in the session's VarTable and stay defined for later lines

"""
