"""
Contact App

Personal (user-to-user) contact messages submitted via the API:
- POST /api/contact-user

Features:
- Recipient lookup and contact-preference check
- Message records stored before mail dispatch
- Mail to the recipient, optional copy to the sender
- Per-sender flood control driven by the contact.settings config object
"""
