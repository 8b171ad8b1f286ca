"""
modules/tool_usage/catalog_data.py
-----------------------------------
Bundled read-only catalog served in stub mode (USE_STUB_CATALOG=true).

Shaped exactly like the remote catalog's JSON responses so the same
parsers (HotelTool._parse_hotel / ActivityTool._parse_activity) handle both.
Keys are destination names; lookups are case-insensitive exact matches.

All prices are whole GBP.
"""

from __future__ import annotations

HOTELS: dict[str, list[dict]] = {
    "Italy": [
        # Rome
        {"id": "rome-luxury-1", "name": "Hotel de Russie", "location": "Via del Babuino, Rome",
         "rating": 4.9, "price_per_night": 850, "review_score": 9.2, "review_count": 2847,
         "lat": 41.9103, "lon": 12.4763,
         "amenities": ["WiFi", "Spa", "Garden", "Restaurant", "Concierge", "Fitness Center"]},
        {"id": "rome-luxury-2", "name": "The First Roma Dolce", "location": "Via del Vantaggio, Rome",
         "rating": 4.8, "price_per_night": 720, "review_score": 9.0, "review_count": 1523,
         "lat": 41.9060, "lon": 12.4790,
         "amenities": ["WiFi", "Spa", "Restaurant", "Bar", "Concierge"]},
        {"id": "rome-premium-1", "name": "Hotel Artemide", "location": "Via Nazionale, Rome",
         "rating": 4.6, "price_per_night": 180, "review_score": 8.5, "review_count": 4251,
         "lat": 41.9009, "lon": 12.4942,
         "amenities": ["WiFi", "Gym", "Spa", "Restaurant", "Business Center"]},
        {"id": "rome-premium-2", "name": "Hotel Sonya", "location": "Via Viminale, Rome",
         "rating": 4.5, "price_per_night": 160, "review_score": 8.3, "review_count": 2834,
         "lat": 41.8998, "lon": 12.4958,
         "amenities": ["WiFi", "Restaurant", "Bar", "Concierge", "Laundry"]},
        # Florence
        {"id": "florence-luxury-1", "name": "Hotel Savoy", "location": "Piazza della Repubblica, Florence",
         "rating": 4.8, "price_per_night": 680, "review_score": 9.1, "review_count": 1789,
         "lat": 43.7714, "lon": 11.2542,
         "amenities": ["WiFi", "Spa", "Restaurant", "Bar", "Concierge"]},
        {"id": "florence-premium-1", "name": "Hotel Davanzati", "location": "Via Porta Rossa, Florence",
         "rating": 4.7, "price_per_night": 165, "review_score": 8.7, "review_count": 2156,
         "lat": 43.7703, "lon": 11.2530,
         "amenities": ["WiFi", "Concierge", "Rooftop Terrace"]},
        {"id": "florence-premium-2", "name": "Hotel Pendini", "location": "Via Strozzi, Florence",
         "rating": 4.6, "price_per_night": 145, "review_score": 8.4, "review_count": 3421,
         "lat": 43.7712, "lon": 11.2537,
         "amenities": ["WiFi", "Restaurant", "Bar", "Concierge"]},
        # Venice
        {"id": "venice-luxury-1", "name": "The Gritti Palace", "location": "Campo Santa Maria del Giglio, Venice",
         "rating": 4.9, "price_per_night": 950, "review_score": 9.3, "review_count": 987,
         "lat": 45.4321, "lon": 12.3336,
         "amenities": ["WiFi", "Spa", "Restaurant", "Canal Views", "Butler Service"]},
        {"id": "venice-premium-1", "name": "Hotel Ai Reali", "location": "Campo della Fava, Venice",
         "rating": 4.8, "price_per_night": 280, "review_score": 8.9, "review_count": 1654,
         "lat": 45.4383, "lon": 12.3386,
         "amenities": ["WiFi", "Spa", "Restaurant", "Canal Views"]},
    ],
    "Japan": [
        {"id": "tokyo-luxury-1", "name": "Park Hyatt Tokyo", "location": "Shinjuku, Tokyo",
         "rating": 4.9, "price_per_night": 450, "review_score": 9.0, "review_count": 2341,
         "lat": 35.6856, "lon": 139.6908,
         "amenities": ["WiFi", "Spa", "Pool", "City Views", "Fitness Center"]},
        {"id": "tokyo-luxury-2", "name": "The Ritz-Carlton Tokyo", "location": "Roppongi, Tokyo",
         "rating": 5.0, "price_per_night": 520, "review_score": 9.2, "review_count": 1876,
         "lat": 35.6655, "lon": 139.7310,
         "amenities": ["WiFi", "Spa", "Club Level", "City Views"]},
        {"id": "tokyo-premium-1", "name": "Hotel Gracery Shinjuku", "location": "Shinjuku, Tokyo",
         "rating": 4.5, "price_per_night": 180, "review_score": 8.4, "review_count": 4567,
         "lat": 35.6946, "lon": 139.7018,
         "amenities": ["WiFi", "Restaurant", "City Views"]},
        {"id": "tokyo-premium-2", "name": "Shibuya Sky Hotel", "location": "Shibuya, Tokyo",
         "rating": 4.6, "price_per_night": 165, "review_score": 8.2, "review_count": 3245,
         "lat": 35.6580, "lon": 139.7016,
         "amenities": ["WiFi", "Restaurant", "Sky Lounge"]},
    ],
    "France": [
        {"id": "paris-luxury-1", "name": "Le Meurice", "location": "Rue de Rivoli, Paris",
         "rating": 4.8, "price_per_night": 890, "review_score": 9.4, "review_count": 1234,
         "lat": 48.8651, "lon": 2.3281,
         "amenities": ["WiFi", "Spa", "Michelin Star Restaurant", "Bar"]},
        {"id": "paris-luxury-2", "name": "Hotel Plaza Athénée", "location": "Avenue Montaigne, Paris",
         "rating": 5.0, "price_per_night": 1200, "review_score": 9.5, "review_count": 876,
         "lat": 48.8662, "lon": 2.3044,
         "amenities": ["WiFi", "Spa", "Michelin Star Restaurant", "Eiffel Tower Views"]},
        {"id": "paris-premium-1", "name": "Hotel des Grands Boulevards", "location": "2nd Arrondissement, Paris",
         "rating": 4.7, "price_per_night": 220, "review_score": 8.6, "review_count": 2567,
         "lat": 48.8710, "lon": 2.3440,
         "amenities": ["WiFi", "Restaurant", "Bar", "Concierge"]},
        {"id": "paris-premium-2", "name": "Hotel Malte Opera", "location": "2nd Arrondissement, Paris",
         "rating": 4.5, "price_per_night": 195, "review_score": 8.3, "review_count": 3456,
         "lat": 48.8685, "lon": 2.3388,
         "amenities": ["WiFi", "Restaurant", "Bar", "Historic Building"]},
    ],
    "Thailand": [
        {"id": "bangkok-luxury-1", "name": "The Oriental Bangkok", "location": "Riverside, Bangkok",
         "rating": 4.9, "price_per_night": 420, "review_score": 9.4, "review_count": 3421,
         "lat": 13.7236, "lon": 100.5141,
         "amenities": ["WiFi", "Spa", "River Views", "Pool", "Butler Service"]},
        {"id": "bangkok-premium-1", "name": "Chatrium Hotel Riverside", "location": "Saphan Phut, Bangkok",
         "rating": 4.6, "price_per_night": 95, "review_score": 8.6, "review_count": 4521,
         "lat": 13.7387, "lon": 100.4957,
         "amenities": ["WiFi", "Pool", "River Views", "Restaurant", "Spa"]},
        {"id": "bangkok-premium-2", "name": "Novotel Bangkok Sukhumvit 20", "location": "Sukhumvit, Bangkok",
         "rating": 4.5, "price_per_night": 85, "review_score": 8.4, "review_count": 3876,
         "lat": 13.7309, "lon": 100.5657,
         "amenities": ["WiFi", "Pool", "Restaurant", "Fitness Center"]},
        {"id": "bangkok-mid-1", "name": "Ibis Bangkok Riverside", "location": "Charoen Krung, Bangkok",
         "rating": 4.5, "price_per_night": 45, "review_score": 8.1, "review_count": 2934,
         "lat": 13.7107, "lon": 100.5109,
         "amenities": ["WiFi", "Restaurant", "River Views", "24h Reception"]},
        {"id": "phuket-premium-1", "name": "Katathani Phuket Beach Resort", "location": "Kata Noi Beach, Phuket",
         "rating": 4.7, "price_per_night": 165, "review_score": 8.7, "review_count": 3421,
         "lat": 7.8054, "lon": 98.2988,
         "amenities": ["WiFi", "Beach Access", "Multiple Pools", "Spa"]},
    ],
    "Spain": [
        {"id": "madrid-luxury-1", "name": "Four Seasons Hotel Madrid", "location": "Calle de Sevilla, Madrid",
         "rating": 4.9, "price_per_night": 650, "review_score": 9.3, "review_count": 1432,
         "lat": 40.4177, "lon": -3.6998,
         "amenities": ["WiFi", "Spa", "Rooftop Terrace", "Restaurant", "Fitness Center"]},
        {"id": "madrid-premium-1", "name": "Hotel Urban", "location": "Carrera de San Jerónimo, Madrid",
         "rating": 4.6, "price_per_night": 210, "review_score": 8.7, "review_count": 2876,
         "lat": 40.4165, "lon": -3.6985,
         "amenities": ["WiFi", "Rooftop Pool", "Restaurant", "Bar"]},
        {"id": "madrid-premium-2", "name": "Hotel Preciados", "location": "Calle de Preciados, Madrid",
         "rating": 4.5, "price_per_night": 150, "review_score": 8.5, "review_count": 3120,
         "lat": 40.4197, "lon": -3.7063,
         "amenities": ["WiFi", "Restaurant", "Concierge"]},
        {"id": "madrid-mid-1", "name": "Hostal Persal", "location": "Plaza del Ángel, Madrid",
         "rating": 4.2, "price_per_night": 75, "review_score": 8.2, "review_count": 4210,
         "lat": 40.4143, "lon": -3.7015,
         "amenities": ["WiFi", "24h Reception", "Breakfast"]},
        {"id": "barcelona-premium-1", "name": "Hotel Casa Fuster", "location": "Passeig de Gràcia, Barcelona",
         "rating": 4.6, "price_per_night": 240, "review_score": 8.8, "review_count": 1987,
         "lat": 41.3987, "lon": 2.1571,
         "amenities": ["WiFi", "Rooftop Pool", "Jazz Bar", "Restaurant"]},
    ],
    "Greece": [
        {"id": "athens-luxury-1", "name": "Hotel Grande Bretagne", "location": "Syntagma Square, Athens",
         "rating": 4.8, "price_per_night": 480, "review_score": 9.1, "review_count": 2543,
         "lat": 37.9760, "lon": 23.7353,
         "amenities": ["WiFi", "Spa", "Rooftop Restaurant", "Pool", "Acropolis Views"]},
        {"id": "athens-premium-1", "name": "Electra Metropolis", "location": "Mitropoleos, Athens",
         "rating": 4.7, "price_per_night": 190, "review_score": 8.9, "review_count": 3102,
         "lat": 37.9752, "lon": 23.7310,
         "amenities": ["WiFi", "Rooftop Pool", "Restaurant", "Acropolis Views"]},
        {"id": "athens-premium-2", "name": "Herodion Hotel", "location": "Rovertou Galli, Athens",
         "rating": 4.5, "price_per_night": 140, "review_score": 8.6, "review_count": 2765,
         "lat": 37.9683, "lon": 23.7256,
         "amenities": ["WiFi", "Roof Garden", "Restaurant", "Bar"]},
        {"id": "athens-mid-1", "name": "Athens Center Square", "location": "Aristogeitonos, Athens",
         "rating": 4.2, "price_per_night": 70, "review_score": 8.3, "review_count": 1876,
         "lat": 37.9803, "lon": 23.7255,
         "amenities": ["WiFi", "Breakfast", "24h Reception"]},
        {"id": "santorini-premium-1", "name": "Canaves Oia", "location": "Oia, Santorini",
         "rating": 4.9, "price_per_night": 650, "review_score": 9.4, "review_count": 987,
         "lat": 36.4618, "lon": 25.3753,
         "amenities": ["WiFi", "Infinity Pool", "Caldera Views", "Spa"]},
    ],
}


ACTIVITIES: dict[str, list[dict]] = {
    "Italy": [
        {"id": "colosseum-tour", "name": "Colosseum & Roman Forum Tour", "type": "sightseeing",
         "cost": 45, "time_slot": "morning", "lat": 41.8902, "lon": 12.4922, "rating": 4.7,
         "duration_minutes": 180, "tags": ["history", "ancient", "guided", "skip-the-line"]},
        {"id": "vatican-museums", "name": "Vatican Museums & Sistine Chapel", "type": "sightseeing",
         "cost": 65, "time_slot": "morning", "lat": 41.9034, "lon": 12.4546, "rating": 4.8,
         "duration_minutes": 240, "tags": ["art", "history", "religious", "renaissance", "guided"]},
        {"id": "borghese-gallery", "name": "Borghese Gallery & Gardens", "type": "sightseeing",
         "cost": 22, "time_slot": "morning", "lat": 41.9142, "lon": 12.4923, "rating": 4.7,
         "duration_minutes": 150, "tags": ["art", "museum", "renaissance", "gardens"]},
        {"id": "pantheon-visit", "name": "Pantheon & Piazza Navona Walk", "type": "sightseeing",
         "cost": 5, "time_slot": "flexible", "lat": 41.8986, "lon": 12.4769, "rating": 4.8,
         "duration_minutes": 90, "tags": ["history", "ancient", "architecture", "landmark"]},
        {"id": "roman-food-tour", "name": "Roman Street Food Tour", "type": "restaurant",
         "cost": 55, "time_slot": "evening", "lat": 41.8839, "lon": 12.4677, "rating": 4.6,
         "duration_minutes": 180, "tags": ["food", "local", "guided", "walking", "authentic"]},
        {"id": "trattoria-monti", "name": "Trattoria Monti", "type": "restaurant",
         "cost": 35, "time_slot": "evening", "lat": 41.8960, "lon": 12.4985, "rating": 4.6,
         "duration_minutes": 120, "tags": ["food", "local", "traditional", "pasta"]},
        {"id": "pizzeria-trastevere", "name": "Pizzeria in Trastevere", "type": "restaurant",
         "cost": 22, "time_slot": "evening", "lat": 41.8893, "lon": 12.4700, "rating": 4.5,
         "duration_minutes": 90, "tags": ["food", "pizza", "local", "casual"]},
        {"id": "cooking-class-rome", "name": "Italian Cooking Class", "type": "activity",
         "cost": 75, "time_slot": "afternoon", "lat": 41.9028, "lon": 12.4964, "rating": 4.9,
         "duration_minutes": 240, "tags": ["cooking", "hands-on", "food", "local", "interactive"]},
        {"id": "vespa-tour-rome", "name": "Vespa Tour of Rome", "type": "activity",
         "cost": 80, "time_slot": "afternoon", "lat": 41.9028, "lon": 12.4964, "rating": 4.8,
         "duration_minutes": 180, "tags": ["adventure", "guided", "photography", "local"]},
        {"id": "appian-way-bike", "name": "Appian Way Bike Ride", "type": "activity",
         "cost": 40, "time_slot": "afternoon", "lat": 41.8580, "lon": 12.5150, "rating": 4.6,
         "duration_minutes": 180, "tags": ["nature", "cycling", "history", "outdoors"]},
        {"id": "trevi-fountain-walk", "name": "Evening Trevi Fountain Stroll", "type": "sightseeing",
         "cost": 0, "time_slot": "evening", "lat": 41.9009, "lon": 12.4833, "rating": 4.5,
         "duration_minutes": 60, "tags": ["romantic", "free", "landmark", "photography"]},
        # Florence
        {"id": "uffizi-gallery", "name": "Uffizi Gallery Tour", "type": "sightseeing",
         "cost": 40, "time_slot": "morning", "lat": 43.7679, "lon": 11.2554, "rating": 4.7,
         "duration_minutes": 180, "tags": ["art", "renaissance", "museum", "guided"]},
        {"id": "duomo-climb", "name": "Florence Cathedral Dome Climb", "type": "sightseeing",
         "cost": 25, "time_slot": "morning", "lat": 43.7731, "lon": 11.2560, "rating": 4.6,
         "duration_minutes": 90, "tags": ["architecture", "climbing", "views", "cathedral"]},
        {"id": "tuscan-dinner", "name": "Traditional Tuscan Dinner", "type": "restaurant",
         "cost": 65, "time_slot": "evening", "lat": 43.7654, "lon": 11.2486, "rating": 4.8,
         "duration_minutes": 150, "tags": ["fine-dining", "local", "wine", "traditional"]},
    ],
    "France": [
        {"id": "louvre-tour", "name": "Louvre Museum Highlights Tour", "type": "sightseeing",
         "cost": 55, "time_slot": "morning", "lat": 48.8606, "lon": 2.3376, "rating": 4.6,
         "duration_minutes": 180, "tags": ["art", "museum", "guided", "skip-the-line", "famous"]},
        {"id": "musee-orsay", "name": "Musée d'Orsay", "type": "sightseeing",
         "cost": 16, "time_slot": "morning", "lat": 48.8600, "lon": 2.3266, "rating": 4.8,
         "duration_minutes": 150, "tags": ["art", "museum", "impressionism"]},
        {"id": "eiffel-tower", "name": "Eiffel Tower Summit Visit", "type": "sightseeing",
         "cost": 35, "time_slot": "afternoon", "lat": 48.8584, "lon": 2.2945, "rating": 4.5,
         "duration_minutes": 120, "tags": ["landmark", "views", "iconic", "photography"]},
        {"id": "montmartre-walk", "name": "Montmartre Artists' Walk", "type": "sightseeing",
         "cost": 0, "time_slot": "afternoon", "lat": 48.8867, "lon": 2.3431, "rating": 4.6,
         "duration_minutes": 120, "tags": ["art", "local", "views", "free"]},
        {"id": "seine-river-cruise", "name": "Seine River Evening Cruise", "type": "sightseeing",
         "cost": 25, "time_slot": "evening", "lat": 48.8566, "lon": 2.3522, "rating": 4.4,
         "duration_minutes": 90, "tags": ["romantic", "cruise", "evening", "relaxing"]},
        {"id": "french-cooking-class", "name": "French Pastry Making Class", "type": "activity",
         "cost": 85, "time_slot": "afternoon", "lat": 48.8566, "lon": 2.3616, "rating": 4.8,
         "duration_minutes": 180, "tags": ["cooking", "pastry", "hands-on", "local"]},
        {"id": "paris-bistro-dinner", "name": "Classic Paris Bistro Experience", "type": "restaurant",
         "cost": 75, "time_slot": "evening", "lat": 48.8534, "lon": 2.3350, "rating": 4.7,
         "duration_minutes": 150, "tags": ["bistro", "traditional", "wine", "romantic"]},
        {"id": "bouillon-chartier", "name": "Bouillon Chartier", "type": "restaurant",
         "cost": 25, "time_slot": "evening", "lat": 48.8718, "lon": 2.3436, "rating": 4.4,
         "duration_minutes": 90, "tags": ["food", "traditional", "local", "historic"]},
    ],
    "Japan": [
        {"id": "tsukiji-food-tour", "name": "Tsukiji Outer Market Food Tour", "type": "restaurant",
         "cost": 65, "time_slot": "morning", "lat": 35.6654, "lon": 139.7707, "rating": 4.9,
         "duration_minutes": 180, "tags": ["sushi", "market", "early-morning", "authentic"]},
        {"id": "meiji-shrine", "name": "Meiji Shrine & Yoyogi Park", "type": "sightseeing",
         "cost": 0, "time_slot": "morning", "lat": 35.6764, "lon": 139.6993, "rating": 4.7,
         "duration_minutes": 120, "tags": ["temple", "traditional", "nature", "free", "cultural"]},
        {"id": "senso-ji-temple", "name": "Senso-ji Temple & Asakusa District", "type": "sightseeing",
         "cost": 0, "time_slot": "afternoon", "lat": 35.7148, "lon": 139.7967, "rating": 4.6,
         "duration_minutes": 120, "tags": ["temple", "traditional", "free", "cultural", "historic"]},
        {"id": "tokyo-cooking-class", "name": "Japanese Home Cooking Class", "type": "activity",
         "cost": 90, "time_slot": "afternoon", "lat": 35.6598, "lon": 139.7006, "rating": 4.8,
         "duration_minutes": 240, "tags": ["cooking", "sushi", "ramen", "hands-on"]},
        {"id": "teamlab-planets", "name": "teamLab Planets", "type": "entertainment",
         "cost": 30, "time_slot": "afternoon", "lat": 35.6491, "lon": 139.7898, "rating": 4.7,
         "duration_minutes": 120, "tags": ["art", "modern", "photography", "interactive"]},
        {"id": "shibuya-crossing", "name": "Shibuya Crossing Experience", "type": "sightseeing",
         "cost": 0, "time_slot": "flexible", "lat": 35.6598, "lon": 139.7006, "rating": 4.3,
         "duration_minutes": 60, "tags": ["urban", "free", "iconic", "photography", "modern"]},
        {"id": "ramen-yokocho", "name": "Omoide Yokocho Ramen Alley", "type": "restaurant",
         "cost": 15, "time_slot": "evening", "lat": 35.6938, "lon": 139.6995, "rating": 4.5,
         "duration_minutes": 90, "tags": ["food", "ramen", "local", "street-food"]},
        {"id": "traditional-kaiseki", "name": "Traditional Kaiseki Dinner", "type": "restaurant",
         "cost": 150, "time_slot": "evening", "lat": 35.6719, "lon": 139.7644, "rating": 4.9,
         "duration_minutes": 180, "tags": ["fine-dining", "traditional", "kaiseki", "cultural"]},
    ],
    "Thailand": [
        {"id": "grand-palace", "name": "Grand Palace & Wat Phra Kaew", "type": "sightseeing",
         "cost": 15, "time_slot": "morning", "lat": 13.7500, "lon": 100.4913, "rating": 4.7,
         "duration_minutes": 180, "tags": ["temple", "history", "cultural", "architecture"]},
        {"id": "wat-arun", "name": "Wat Arun at Sunset", "type": "sightseeing",
         "cost": 3, "time_slot": "afternoon", "lat": 13.7437, "lon": 100.4889, "rating": 4.6,
         "duration_minutes": 90, "tags": ["temple", "cultural", "photography", "views"]},
        {"id": "thai-massage", "name": "Traditional Thai Massage at Wat Pho", "type": "wellness",
         "cost": 20, "time_slot": "afternoon", "lat": 13.7466, "lon": 100.4930, "rating": 4.5,
         "duration_minutes": 60, "tags": ["wellness", "spa", "relaxation"]},
        {"id": "chinatown-street-food", "name": "Yaowarat Street Food Crawl", "type": "restaurant",
         "cost": 12, "time_slot": "evening", "lat": 13.7398, "lon": 100.5100, "rating": 4.6,
         "duration_minutes": 150, "tags": ["food", "street-food", "local", "authentic"]},
    ],
    "Spain": [
        {"id": "prado-museum", "name": "Museo del Prado", "type": "sightseeing",
         "cost": 15, "time_slot": "morning", "lat": 40.4138, "lon": -3.6921, "rating": 4.8,
         "duration_minutes": 180, "tags": ["art", "museum", "famous", "renaissance"]},
        {"id": "royal-palace-madrid", "name": "Royal Palace of Madrid", "type": "sightseeing",
         "cost": 14, "time_slot": "morning", "lat": 40.4180, "lon": -3.7143, "rating": 4.6,
         "duration_minutes": 120, "tags": ["history", "architecture", "palace"]},
        {"id": "reina-sofia", "name": "Museo Reina Sofía", "type": "sightseeing",
         "cost": 12, "time_slot": "flexible", "lat": 40.4086, "lon": -3.6945, "rating": 4.6,
         "duration_minutes": 150, "tags": ["art", "museum", "modern"]},
        {"id": "retiro-park", "name": "Retiro Park & Crystal Palace", "type": "sightseeing",
         "cost": 0, "time_slot": "afternoon", "lat": 40.4153, "lon": -3.6845, "rating": 4.7,
         "duration_minutes": 120, "tags": ["nature", "park", "free", "relaxing"]},
        {"id": "flamenco-class", "name": "Flamenco Dance Class", "type": "activity",
         "cost": 35, "time_slot": "afternoon", "lat": 40.4130, "lon": -3.7040, "rating": 4.7,
         "duration_minutes": 90, "tags": ["culture", "dance", "hands-on", "local"]},
        {"id": "paella-cooking-class", "name": "Paella Cooking Class", "type": "activity",
         "cost": 70, "time_slot": "afternoon", "lat": 40.4200, "lon": -3.7010, "rating": 4.8,
         "duration_minutes": 180, "tags": ["cooking", "food", "hands-on"]},
        {"id": "la-latina-tapas", "name": "La Latina Tapas Crawl", "type": "restaurant",
         "cost": 45, "time_slot": "evening", "lat": 40.4109, "lon": -3.7108, "rating": 4.7,
         "duration_minutes": 180, "tags": ["food", "tapas", "local", "guided"]},
        {"id": "sobrino-de-botin", "name": "Sobrino de Botín", "type": "restaurant",
         "cost": 50, "time_slot": "evening", "lat": 40.4141, "lon": -3.7082, "rating": 4.5,
         "duration_minutes": 120, "tags": ["food", "traditional", "historic"]},
        {"id": "mercado-san-miguel", "name": "Mercado de San Miguel", "type": "restaurant",
         "cost": 20, "time_slot": "evening", "lat": 40.4154, "lon": -3.7090, "rating": 4.4,
         "duration_minutes": 90, "tags": ["food", "market", "local"]},
    ],
    "Greece": [
        {"id": "acropolis-tour", "name": "Acropolis & Parthenon Guided Tour", "type": "sightseeing",
         "cost": 40, "time_slot": "morning", "lat": 37.9715, "lon": 23.7257, "rating": 4.8,
         "duration_minutes": 180, "tags": ["history", "ancient", "guided", "landmark"]},
        {"id": "acropolis-museum", "name": "Acropolis Museum", "type": "sightseeing",
         "cost": 15, "time_slot": "morning", "lat": 37.9685, "lon": 23.7285, "rating": 4.7,
         "duration_minutes": 150, "tags": ["history", "museum", "art"]},
        {"id": "ancient-agora", "name": "Ancient Agora & Temple of Hephaestus", "type": "sightseeing",
         "cost": 10, "time_slot": "flexible", "lat": 37.9747, "lon": 23.7224, "rating": 4.6,
         "duration_minutes": 120, "tags": ["history", "ancient", "architecture"]},
        {"id": "lycabettus-hike", "name": "Mount Lycabettus Sunset Hike", "type": "activity",
         "cost": 0, "time_slot": "afternoon", "lat": 37.9819, "lon": 23.7434, "rating": 4.7,
         "duration_minutes": 120, "tags": ["nature", "hiking", "views", "free"]},
        {"id": "greek-cooking-class", "name": "Greek Cooking Class in Plaka", "type": "activity",
         "cost": 65, "time_slot": "afternoon", "lat": 37.9725, "lon": 23.7300, "rating": 4.8,
         "duration_minutes": 180, "tags": ["cooking", "food", "hands-on", "local"]},
        {"id": "plaka-taverna", "name": "Plaka Taverna Dinner", "type": "restaurant",
         "cost": 30, "time_slot": "evening", "lat": 37.9722, "lon": 23.7295, "rating": 4.5,
         "duration_minutes": 120, "tags": ["food", "traditional", "local"]},
        {"id": "psyrri-meze", "name": "Psyrri Meze & Rooftop Dinner", "type": "restaurant",
         "cost": 40, "time_slot": "evening", "lat": 37.9780, "lon": 23.7240, "rating": 4.6,
         "duration_minutes": 120, "tags": ["food", "local", "views"]},
        {"id": "monastiraki-street-food", "name": "Monastiraki Street Food Walk", "type": "restaurant",
         "cost": 25, "time_slot": "evening", "lat": 37.9761, "lon": 23.7257, "rating": 4.5,
         "duration_minutes": 120, "tags": ["food", "street-food", "local"]},
    ],
}


def lookup(table: dict[str, list[dict]], destination: str) -> list[dict]:
    """Rows for `destination` (case-insensitive exact key match), or []."""
    key = destination.strip().lower()
    for name, rows in table.items():
        if name.lower() == key:
            return rows
    return []
