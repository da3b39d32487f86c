"""
RSVP relay: encaminha inscrições de eventos para a API de assinantes do MailerLite.
"""
__version__ = "0.1.0"
