from typing import Optional

from flask import Flask, jsonify, request

from mystery_country.boundaries import BoundaryStore, load_boundaries
from mystery_country.cache import DistanceCache
from mystery_country.config import COUNTRY_DATA_FILE, configure_logging
from mystery_country.query import InvalidQueryError, parse_distance_input
from mystery_country.search import find_candidates


def create_app(store: Optional[BoundaryStore] = None, cache: Optional[DistanceCache] = None) -> Flask:
    app = Flask(__name__)

    if store is None:
        app.logger.info("Starting initial boundary loading...")
        store = load_boundaries(COUNTRY_DATA_FILE)
        if store is None:
            app.logger.critical("FATAL: Failed to load country boundaries during startup.")
            store = BoundaryStore()
        else:
            app.logger.info(f"Successfully loaded {len(store)} countries.")

    app.config['BOUNDARY_STORE'] = store
    app.config['DISTANCE_CACHE'] = cache if cache is not None else DistanceCache()

    @app.route('/countries', methods=['GET'])
    def list_countries():
        store = app.config['BOUNDARY_STORE']
        if len(store) == 0:
            return jsonify({'error': 'Country data not loaded'}), 500
        return jsonify({'countries': store.names()})

    @app.route('/candidates', methods=['GET'])
    def candidates():
        store = app.config['BOUNDARY_STORE']
        cache = app.config['DISTANCE_CACHE']
        if len(store) == 0:
            return jsonify({'error': 'Country data not loaded'}), 500

        country_name = request.args.get('country', '').strip()
        distance_text = request.args.get('distance', '').strip()
        if not country_name or not distance_text:
            return jsonify({'error': 'Missing country or distance parameter'}), 400

        try:
            known_distance_km, initial_margin = parse_distance_input(distance_text)
        except InvalidQueryError as e:
            return jsonify({'error': f'Error parsing distance: {e}'}), 400

        guessed = store.find(country_name)
        if guessed is None:
            app.logger.warning(f"Query for unknown country '{country_name}'.")
            return jsonify({'error': f"Country '{country_name}' not found in database"}), 404

        result = find_candidates(guessed, known_distance_km, initial_margin, store, cache)
        return jsonify({
            'guessed': guessed.name,
            'distance_km': known_distance_km,
            'initial_margin_km': result.initial_margin_km,
            'margin_km': result.margin_km,
            'expanded': result.expanded,
            'candidates': result.candidates,
        })

    return app


def run():
    configure_logging()
    # One query at a time; the distance cache is the only shared state.
    create_app().run(threaded=False)


if __name__ == '__main__':
    run()
