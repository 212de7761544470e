"""HTTP and Socket.IO transport for the chatroom"""
