"""Web API of the iconfinder service"""
