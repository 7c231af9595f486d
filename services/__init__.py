"""
services — business logic between the routers and the repositories.

  • ``auth_service``    — register / login / current account
  • ``user_service``    — account listing and self-service updates
  • ``article_service`` — article listing with visibility rules, CRUD
"""
