"""
Retail order service: order fulfillment, stock control and sales reports
"""
