"""
Sandbox Routers - HTTP endpoint handlers

Each router serves one resource group of the SmartShop contract:
- auth: login, registration, email verification, profile (v2, bare JSON)
- catalog: apps, categories, rankings, search, home screen
- social: comments and favorites (v1, enveloped)
- reports: abuse reports (v1, enveloped)
- version: latest client release (v2, bare JSON)
"""
