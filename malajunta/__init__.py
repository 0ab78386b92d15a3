"""Mala Junta community web client backed by Supabase."""
