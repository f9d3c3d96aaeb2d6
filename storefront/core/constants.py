# Response messages kept stable for existing frontends
MISSING_ORDER_DETAILS = "Missing order details"
ORDER_PLACED = "Order placed successfully!"
USER_NOT_FOUND = "User not found"
INTERNAL_ERROR = "Internal server error"
