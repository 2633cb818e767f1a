"""Write a ZNP request frame to a coordinator UART and print the reply."""

__version__ = "0.1.0"
