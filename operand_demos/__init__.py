"""Operand webhook ingester and long-term memory chatbot."""
