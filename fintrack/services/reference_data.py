"""
reference_data.py — Static Indian finance reference data
Seed rows for shared categories and payment methods, plus lookup lists served
by the reference endpoints.
"""


def _category(name, type, icon, color, description):
    return {
        "name": name,
        "type": type,
        "icon": icon,
        "color": color,
        "description": description,
        "is_default": True,
        "is_active": True,
    }


DEFAULT_CATEGORIES = [
    # Income
    _category("Salary", "income", "💼", "#10B981", "Monthly salary income"),
    _category("Freelance Income", "income", "💻", "#3B82F6", "Freelance project income"),
    _category("Business Income", "income", "🏢", "#8B5CF6", "Business profits"),
    _category("Rental Income", "income", "🏠", "#F59E0B", "Property rental income"),
    _category("Interest Income", "income", "📈", "#10B981", "Bank interest and other interest income"),
    _category("Dividends", "income", "📊", "#84CC16", "Stock dividends and mutual fund distributions"),
    _category("Pension", "income", "👴", "#06B6D4", "Retirement pension income"),
    _category("Agricultural Income", "income", "🌾", "#EC4899", "Agricultural income"),
    _category("Other Income", "income", "💰", "#6B7280", "Other sources of income"),
    # Expense
    _category("Groceries & Vegetables", "expense", "🛒", "#EF4444", "Groceries and vegetables"),
    _category("Dairy Products", "expense", "🥛", "#F59E0B", "Milk, curd, cheese and other dairy products"),
    _category("Electricity & Water", "expense", "💡", "#F59E0B", "Electricity and water bills"),
    _category("Mobile & Internet", "expense", "📱", "#3B82F6", "Mobile recharge and internet bills"),
    _category("Rent & Housing", "expense", "🏠", "#8B5CF6", "Rent and housing expenses"),
    _category("Transport & Fuel", "expense", "🚗", "#3B82F6", "Transportation and fuel expenses"),
    _category("Medical & Healthcare", "expense", "🏥", "#EF4444", "Medical expenses and healthcare"),
    _category("Education & Books", "expense", "📚", "#3B82F6", "Education fees and books"),
    _category("Clothing & Fashion", "expense", "👕", "#EC4899", "Clothing and fashion accessories"),
    _category("Entertainment & Movies", "expense", "🎬", "#8B5CF6", "Entertainment and movies"),
    _category("Restaurants & Food Delivery", "expense", "🍽️", "#EF4444", "Restaurant meals and food delivery"),
    _category("Temple & Donations", "expense", "🛕", "#F59E0B", "Temple donations and charity"),
    _category("Festivals & Celebrations", "expense", "🎉", "#EC4899", "Festival expenses and celebrations"),
    _category("Gold & Jewelry", "expense", "💍", "#F59E0B", "Gold and jewelry purchases"),
    _category("Insurance Premiums", "expense", "🛡️", "#06B6D4", "Life, health, and other insurance premiums"),
    _category("EMI & Loans", "expense", "🏦", "#EF4444", "EMI payments and loan installments"),
    _category("Taxes & GST", "expense", "📄", "#EF4444", "Income tax and GST payments"),
    _category("Online Shopping", "expense", "🛍️", "#8B5CF6", "E-commerce and online shopping"),
    _category("Fresh Vegetables & Fruits", "expense", "🥬", "#10B981", "Fresh vegetables and fruits"),
    _category("Snacks & Sweets", "expense", "🍬", "#EC4899", "Snacks, sweets and beverages"),
    _category("Other Expenses", "expense", "💸", "#6B7280", "Other miscellaneous expenses"),
]

DEFAULT_PAYMENT_METHODS = [
    {"name": "Cash", "description": "Physical cash payments"},
    {"name": "UPI", "description": "Unified Payments Interface"},
    {"name": "Debit Card", "description": "Bank debit card payments"},
    {"name": "Credit Card", "description": "Credit card payments"},
    {"name": "Net Banking", "description": "Online banking transfers"},
    {"name": "Cheque", "description": "Bank cheque payments"},
    {"name": "Paytm", "description": "Paytm wallet payments"},
    {"name": "PhonePe", "description": "PhonePe wallet payments"},
    {"name": "Google Pay", "description": "Google Pay wallet payments"},
    {"name": "Amazon Pay", "description": "Amazon Pay wallet payments"},
]

BANKS = [
    {"id": "sbi", "name": "State Bank of India", "code": "SBI"},
    {"id": "hdfc", "name": "HDFC Bank", "code": "HDFC"},
    {"id": "icici", "name": "ICICI Bank", "code": "ICICI"},
    {"id": "pnb", "name": "Punjab National Bank", "code": "PNB"},
    {"id": "bob", "name": "Bank of Baroda", "code": "BOB"},
    {"id": "axis", "name": "Axis Bank", "code": "AXIS"},
    {"id": "kotak", "name": "Kotak Mahindra Bank", "code": "KOTAK"},
    {"id": "canara", "name": "Canara Bank", "code": "CANARA"},
    {"id": "union", "name": "Union Bank of India", "code": "UBI"},
    {"id": "indian", "name": "Indian Bank", "code": "IBL"},
]

FINANCIAL_TERMS = {
    "SIP": "Systematic Investment Plan - Regular monthly investment in mutual funds",
    "EMI": "Equated Monthly Installment - Monthly loan payment",
    "FD": "Fixed Deposit - Bank deposit with fixed interest rate",
    "RD": "Recurring Deposit - Monthly savings deposit",
    "PPF": "Public Provident Fund - Long-term government savings scheme",
    "EPF": "Employee Provident Fund - Retirement savings for employees",
    "NPS": "National Pension System - Government pension scheme",
    "ELSS": "Equity Linked Savings Scheme - Tax-saving mutual fund",
    "GST": "Goods and Services Tax - Indirect tax on goods and services",
    "TDS": "Tax Deducted at Source - Tax deducted before payment",
    "ITR": "Income Tax Return - Annual tax filing",
    "PAN": "Permanent Account Number - Tax identification number",
    "UPI": "Unified Payments Interface - Instant payment system",
    "IMPS": "Immediate Payment Service - Instant money transfer",
    "NEFT": "National Electronic Funds Transfer - Money transfer system",
    "RTGS": "Real Time Gross Settlement - High-value money transfer",
    "LTCG": "Long Term Capital Gains - Tax on long-term investments",
    "STCG": "Short Term Capital Gains - Tax on short-term investments",
}
