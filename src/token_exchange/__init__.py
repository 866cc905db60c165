"""Token Exchange - swap a fungible token against native currency.

An administrator provisions a token pool and a native-currency pool at
a fixed ratio; users swap one asset for the other, and swaps the pools
cannot cover become pending orders the administrator executes later.
"""

__version__ = "1.0.0"
