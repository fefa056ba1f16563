"""
Core primitives: numeral alphabets, conversion, decimal arithmetic.

Компоненты не зависят от процессного runtime, кроме BigNumber
(domain), который по умолчанию берёт runtime из bignum.runtime.
"""
