"""UI hosts embedding the editor session."""
