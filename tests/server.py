"""
A small in-memory gdapi server used by the client tests.
"""
import copy

from flask import Flask, jsonify, request

BASE = 'http://api.example.com/v1'

AUTOMOBILE_SCHEMA = {
    'id': 'automobile',
    'type': 'schema',
    'links': {
        'self': BASE + '/schemas/automobile',
        'collection': BASE + '/automobiles'
    },
    'resourceFields': {
        'make': {'type': 'string'},
        'model': {'type': 'string'},
        'year': {'type': 'int'}
    },
    'resourceMethods': ['GET', 'PUT', 'DELETE'],
    'collectionMethods': ['GET', 'POST'],
    'resourceActions': {
        'charge': {'input': 'chargeInput', 'output': 'automobile'}
    },
    'collectionFilters': {
        'make': {'modifiers': ['eq', 'ne']},
        'year': {'modifiers': ['eq', 'lt', 'gt']}
    }
}

SCHEMAS = {
    'type': 'collection',
    'resourceType': 'schema',
    'links': {'self': BASE + '/schemas'},
    'data': [AUTOMOBILE_SCHEMA]
}

AUTOMOBILES = {
    '1001': {'id': '1001', 'make': 'Tesla', 'model': 'S', 'year': 2012},
    '1002': {'id': '1002', 'make': 'Tesla', 'model': 'X', 'year': 2015},
    '1003': {'id': '1003', 'make': 'Ford', 'model': 'Focus', 'year': 2010},
}

_QUERY_PARAMS = ('sort', 'order', 'limit', 'marker')


def _automobile(car):
    url = '{}/automobiles/{}'.format(BASE, car['id'])
    return dict(car,
                type='automobile',
                links={'self': url, 'schemas': BASE + '/schemas'},
                actions={'charge': url + '?action=charge'})


def _not_found(id):
    return jsonify({
        'type': 'error',
        'status': 404,
        'code': 'NotFound',
        'message': 'Automobile {} not found'.format(id)
    }), 404


def create_app():
    app = Flask(__name__)
    app.requests_seen = []
    cars = copy.deepcopy(AUTOMOBILES)

    @app.before_request
    def record_request():
        username = request.authorization.username if request.authorization else None
        app.requests_seen.append((request.method, request.path, request.query_string.decode('utf-8'), username))

    @app.route('/v1/schemas')
    def schemas():
        return jsonify(SCHEMAS)

    @app.route('/v1/schemas/<id>')
    def schema(id):
        return jsonify(AUTOMOBILE_SCHEMA)

    @app.route('/v1/automobiles', methods=['GET'])
    def automobiles():
        items = sorted(cars.values(), key=lambda car: car['id'])

        for key, values in request.args.lists():
            if key in _QUERY_PARAMS:
                continue
            if key.endswith('_ne'):
                items = [car for car in items if str(car.get(key[:-3])) not in values]
            else:
                items = [car for car in items if str(car.get(key)) in values]

        sort = request.args.get('sort')
        if sort:
            items.sort(key=lambda car: car.get(sort), reverse=request.args.get('order') == 'desc')

        limit = request.args.get('limit', type=int)
        marker = request.args.get('marker', 0, type=int)
        pagination = {'total': len(items)}
        if limit:
            pagination['limit'] = limit
            if marker + limit < len(items):
                pagination['next'] = '{}/automobiles?limit={}&marker={}'.format(BASE, limit, marker + limit)
            items = items[marker:marker + limit]

        return jsonify({
            'type': 'collection',
            'resourceType': 'automobile',
            'links': {'self': request.url, 'schemas': BASE + '/schemas'},
            'pagination': pagination,
            'sortLinks': {
                'year': BASE + '/automobiles?sort=year'
            },
            'data': [_automobile(car) for car in items]
        })

    @app.route('/v1/automobiles', methods=['POST'])
    def create_automobile():
        data = request.get_json()
        id = str(max(int(i) for i in cars) + 1)
        cars[id] = car = {'id': id}
        for key in ('make', 'model', 'year'):
            car[key] = data.get(key)
        return jsonify(_automobile(car)), 201

    @app.route('/v1/automobiles/<id>', methods=['GET'])
    def read_automobile(id):
        if id not in cars:
            return _not_found(id)
        return jsonify(_automobile(cars[id]))

    @app.route('/v1/automobiles/<id>', methods=['PUT'])
    def update_automobile(id):
        if id not in cars:
            return _not_found(id)
        data = request.get_json()
        for key in ('make', 'model', 'year'):
            if key in data:
                cars[id][key] = data[key]
        return jsonify(_automobile(cars[id]))

    @app.route('/v1/automobiles/<id>', methods=['DELETE'])
    def delete_automobile(id):
        if id not in cars:
            return _not_found(id)
        del cars[id]
        return '', 204

    @app.route('/v1/automobiles/<id>', methods=['POST'])
    def automobile_action(id):
        if id not in cars:
            return _not_found(id)
        if request.args.get('action') != 'charge':
            return jsonify({'type': 'error', 'status': 400, 'code': 'InvalidAction'}), 400
        cars[id]['charged'] = (request.get_json() or {}).get('with')
        return jsonify(_automobile(cars[id]))

    @app.route('/v1/broken')
    def broken():
        return 'Internal Server Error', 500

    return app
