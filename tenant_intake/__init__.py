"""Tenant SMS intake: triage inbound maintenance texts into tickets."""
