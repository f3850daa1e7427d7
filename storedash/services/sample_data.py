"""Placeholder records shown when a screen cannot reach the backend."""

SAMPLE_CUSTOMERS = [
    {"id": "1", "name": "John Doe", "email": "john@example.com", "phone": "+1 234 567 890", "status": "active", "createdAt": "2024-01-15", "totalOrders": 12, "totalSpent": 1250},
    {"id": "2", "name": "Jane Smith", "email": "jane@example.com", "phone": "+1 234 567 891", "status": "active", "createdAt": "2024-02-20", "totalOrders": 8, "totalSpent": 890},
    {"id": "3", "name": "Bob Wilson", "email": "bob@example.com", "phone": "+1 234 567 892", "status": "active", "createdAt": "2024-03-10", "totalOrders": 25, "totalSpent": 3200},
    {"id": "4", "name": "Alice Brown", "email": "alice@example.com", "phone": "+1 234 567 893", "status": "active", "createdAt": "2024-01-25", "totalOrders": 5, "totalSpent": 450},
    {"id": "5", "name": "Charlie Davis", "email": "charlie@example.com", "phone": "+1 234 567 894", "status": "active", "createdAt": "2024-04-05", "totalOrders": 15, "totalSpent": 1800},
]

SAMPLE_ORDERS = [
    {"id": "ORD-001", "customerName": "John Doe", "customerEmail": "john@example.com", "status": "completed", "total": 299, "items": [{"name": "Wireless Headphones", "quantity": 1, "price": 299}], "createdAt": "2024-04-10"},
    {"id": "ORD-002", "customerName": "Jane Smith", "customerEmail": "jane@example.com", "status": "processing", "total": 398, "items": [{"name": "Smart Watch", "quantity": 2, "price": 199}], "createdAt": "2024-04-12"},
    {"id": "ORD-003", "customerName": "Bob Wilson", "customerEmail": "bob@example.com", "status": "pending", "total": 129, "items": [{"name": "Running Shoes", "quantity": 1, "price": 129}], "createdAt": "2024-04-13"},
    {"id": "ORD-004", "customerName": "Alice Brown", "customerEmail": "alice@example.com", "status": "shipped", "total": 148, "items": [{"name": "Coffee Maker", "quantity": 1, "price": 89}, {"name": "Leather Wallet", "quantity": 1, "price": 59}], "createdAt": "2024-04-14"},
    {"id": "ORD-005", "customerName": "Charlie Davis", "customerEmail": "charlie@example.com", "status": "completed", "total": 597, "items": [{"name": "Smart Watch", "quantity": 3, "price": 199}], "createdAt": "2024-04-15"},
]

SAMPLE_PAYMENTS = [
    {"id": "PAY-001", "orderId": "ORD-001", "customerName": "John Doe", "amount": 299, "method": "Credit Card", "status": "completed", "createdAt": "2024-04-10"},
    {"id": "PAY-002", "orderId": "ORD-002", "customerName": "Jane Smith", "amount": 398, "method": "PayPal", "status": "completed", "createdAt": "2024-04-12"},
    {"id": "PAY-003", "orderId": "ORD-003", "customerName": "Bob Wilson", "amount": 129, "method": "Credit Card", "status": "pending", "createdAt": "2024-04-13"},
    {"id": "PAY-004", "orderId": "ORD-004", "customerName": "Alice Brown", "amount": 148, "method": "Debit Card", "status": "completed", "createdAt": "2024-04-14"},
    {"id": "PAY-005", "orderId": "ORD-005", "customerName": "Charlie Davis", "amount": 597, "method": "Credit Card", "status": "completed", "createdAt": "2024-04-15"},
    {"id": "PAY-006", "orderId": "ORD-006", "customerName": "Eve Johnson", "amount": 250, "method": "Credit Card", "status": "refunded", "createdAt": "2024-04-08"},
    {"id": "PAY-007", "orderId": "ORD-007", "customerName": "Frank Miller", "amount": 175, "method": "PayPal", "status": "failed", "createdAt": "2024-04-09"},
]
