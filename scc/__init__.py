"""SCC: backend do sistema de controle comercial."""
