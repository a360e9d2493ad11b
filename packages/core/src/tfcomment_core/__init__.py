"""Terraform CI output reduction and pull request comment publishing."""
