"""
WePadel Coach backend - relays coaching chats to Gemini
"""
