"""Click plumbing shared by the krb5-sync command."""
