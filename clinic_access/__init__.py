"""clinic-access: role-based access control and audit trail for a clinical record app."""
