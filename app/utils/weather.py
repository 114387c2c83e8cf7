# Weather Utility Functions
import logging
from datetime import datetime, timedelta

import requests
from flask import current_app

logger = logging.getLogger(__name__)

DEFAULT_CITY = 'Nairobi'


def get_weather(city=DEFAULT_CITY):
    """
    Fetch current conditions and a short forecast for a city from OpenWeatherMap.

    Args:
        city: City name as typed by the user (e.g., "Nakuru" or "Kisumu, KE")

    Returns:
        dict: {
            'temperature': float (Celsius),
            'humidity': int (percentage),
            'rain_chance': float (0-1),
            'wind_speed': float (km/h),
            'condition': str,
            'description': str,
            'location': str,
            'forecast': list of daily forecast data,
            'last_updated': str,
            'source': 'openweathermap' or 'sample'
        }
    """
    api_key = current_app.config.get('WEATHER_API_KEY')

    # No API key configured: hand back sample data so the client still renders
    if not api_key:
        return _get_mock_weather(city)

    params = {
        'q': city,
        'appid': api_key,
        'units': 'metric'  # Celsius
    }

    try:
        response = requests.get(current_app.config['WEATHER_API_URL'], params=params, timeout=5)
    except requests.RequestException as e:
        logger.warning('Weather lookup for %s failed: %s', city, e)
        return _get_mock_weather(city)

    if response.status_code != 200:
        logger.warning('Weather lookup for %s returned HTTP %s', city, response.status_code)
        return _get_mock_weather(city)

    data = response.json()
    wind_speed = data['wind']['speed'] * 3.6  # m/s to km/h

    rain_chance = 0.0
    if 'rain' in data:
        rain_chance = min(1.0, data['rain'].get('1h', 0) / 10.0)
    elif 'clouds' in data:
        # Estimate rain chance from cloud coverage
        cloud_coverage = data['clouds']['all']
        rain_chance = cloud_coverage / 100.0 if cloud_coverage > 50 else 0.0

    return {
        'temperature': round(data['main']['temp'], 1),
        'humidity': data['main']['humidity'],
        'rain_chance': round(rain_chance, 2),
        'wind_speed': round(wind_speed, 1),
        'condition': data['weather'][0]['main'],
        'description': data['weather'][0]['description'].title(),
        'location': data.get('name') or city,
        'forecast': _get_forecast(city, api_key),
        'last_updated': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
        'source': 'openweathermap',
    }


def _get_forecast(city, api_key):
    """One entry per day for the next 5 days, taken from the 3-hourly forecast."""
    params = {
        'q': city,
        'appid': api_key,
        'units': 'metric'
    }
    try:
        response = requests.get(current_app.config['WEATHER_FORECAST_URL'], params=params, timeout=5)
    except requests.RequestException as e:
        logger.warning('Forecast lookup for %s failed: %s', city, e)
        return []

    if response.status_code != 200:
        return []

    forecast = []
    seen_dates = set()
    for item in response.json().get('list', [])[:40]:  # 5 days * 8 intervals
        date_str = item['dt_txt'].split(' ')[0]
        if date_str in seen_dates:
            continue
        seen_dates.add(date_str)
        forecast.append({
            'date': date_str,
            'temperature': round(item['main']['temp'], 1),
            'condition': item['weather'][0]['main'],
            'description': item['weather'][0]['description'].title(),
            'rain_chance': min(1.0, item.get('rain', {}).get('3h', 0) / 10.0),
        })
        if len(forecast) >= 5:
            break
    return forecast


def _get_mock_weather(city):
    """Return sample weather data when the API is not available"""
    today = datetime.now()
    return {
        'temperature': 24.5,
        'humidity': 68,
        'rain_chance': 0.3,
        'wind_speed': 12.5,
        'condition': 'Clouds',
        'description': 'Partly Cloudy',
        'location': city,
        'forecast': [
            {'date': today.strftime('%Y-%m-%d'), 'temperature': 24.5, 'condition': 'Clouds', 'description': 'Partly Cloudy', 'rain_chance': 0.3},
            {'date': (today + timedelta(days=1)).strftime('%Y-%m-%d'), 'temperature': 25.0, 'condition': 'Clear', 'description': 'Clear Sky', 'rain_chance': 0.1},
        ],
        'last_updated': today.strftime('%Y-%m-%d %H:%M:%S'),
        'source': 'sample',
    }
