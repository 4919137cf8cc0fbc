"""Configuração: settings por provedor e logging estruturado."""
