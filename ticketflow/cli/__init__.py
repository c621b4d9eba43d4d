"""ticketflow command line: flag registration, output and structured errors."""
