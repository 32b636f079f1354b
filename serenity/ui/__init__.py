"""NiceGUI screens - thin presentation layer over the Serenity API.

Importing a page module registers its route with NiceGUI:

    /login      sign-in and registration
    /           home: stress week, ECG measurement, weather, next event
    /calendar   agenda
    /weather    current weather
    /assistant  AI assistant
    /profile    personal details and photo

All data goes through the HTTP API; nothing here talks to Firebase.
"""
