"""HTTP routers, dependencies and error handlers"""
