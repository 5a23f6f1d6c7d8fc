"""Replacement function bodies used by environment-specific builds.

Bodies are written at zero indentation; ``reindent`` shifts them to the
indentation of the declaration they replace.
"""

from __future__ import annotations

# Iteration helpers without the `createIterator` template machinery
INLINED_ITERATORS = {
    "assign": r"""
var assign = function(object, source, guard) {
  var index, iterable = object, result = iterable;
  if (!iterable) return result;
  var args = arguments,
      argsIndex = 0,
      argsLength = typeof guard == 'number' ? 2 : args.length;
  if (argsLength > 3 && typeof args[argsLength - 2] == 'function') {
    var callback = baseCreateCallback(args[--argsLength - 1], args[argsLength--], 2);
  } else if (argsLength > 2 && typeof args[argsLength - 1] == 'function') {
    callback = args[--argsLength];
  }
  while (++argsIndex < argsLength) {
    iterable = args[argsIndex];
    if (iterable && objectTypes[typeof iterable]) {
      var ownIndex = -1,
          ownProps = keys(iterable),
          length = ownProps ? ownProps.length : 0;

      while (++ownIndex < length) {
        index = ownProps[ownIndex];
        result[index] = callback ? callback(result[index], iterable[index]) : iterable[index];
      }
    }
  }
  return result;
};
""",
    "baseEach": r"""
var baseEach = function(collection, callback) {
  var index, iterable = collection, result = iterable;
  if (!iterable) return result;
  var length = iterable.length;
  if (typeof length == 'number') {
    index = -1;
    while (++index < length) {
      if (callback(iterable[index], index, collection) === false) return result;
    }
  } else if (objectTypes[typeof iterable]) {
    var ownIndex = -1,
        ownProps = keys(iterable);

    length = ownProps ? ownProps.length : 0;
    while (++ownIndex < length) {
      index = ownProps[ownIndex];
      if (callback(iterable[index], index, collection) === false) return result;
    }
  }
  return result;
};
""",
    "defaults": r"""
var defaults = function(object, source, guard) {
  var index, iterable = object, result = iterable;
  if (!iterable) return result;
  var args = arguments,
      argsIndex = 0,
      argsLength = typeof guard == 'number' ? 2 : args.length;
  while (++argsIndex < argsLength) {
    iterable = args[argsIndex];
    if (iterable && objectTypes[typeof iterable]) {
      var ownIndex = -1,
          ownProps = keys(iterable),
          length = ownProps ? ownProps.length : 0;

      while (++ownIndex < length) {
        index = ownProps[ownIndex];
        if (typeof result[index] == 'undefined') result[index] = iterable[index];
      }
    }
  }
  return result;
};
""",
    "forIn": r"""
var forIn = function(collection, callback, thisArg) {
  var index, iterable = collection, result = iterable;
  if (!iterable) return result;
  if (!objectTypes[typeof iterable]) return result;
  callback = callback && typeof thisArg == 'undefined' ? callback : baseCreateCallback(callback, thisArg, 3);
  for (index in iterable) {
    if (callback(iterable[index], index, collection) === false) return result;
  }
  return result;
};
""",
    "forOwn": r"""
var forOwn = function(collection, callback, thisArg) {
  var index, iterable = collection, result = iterable;
  if (!iterable) return result;
  if (!objectTypes[typeof iterable]) return result;
  callback = callback && typeof thisArg == 'undefined' ? callback : baseCreateCallback(callback, thisArg, 3);
  var ownIndex = -1,
      ownProps = keys(iterable),
      length = ownProps ? ownProps.length : 0;

  while (++ownIndex < length) {
    index = ownProps[ownIndex];
    if (callback(iterable[index], index, collection) === false) return result;
  }
  return result;
};
""",
    "shimKeys": r"""
var shimKeys = function(object) {
  var index, iterable = object, result = [];
  if (!iterable) return result;
  if (!objectTypes[typeof object]) return result;
  for (index in iterable) {
    if (hasOwnProperty.call(iterable, index)) {
      result.push(index);
    }
  }
  return result;
};
""",
}

MODERN_BODIES = {
    "forEach": r"""
function forEach(collection, callback, thisArg) {
  var index = -1,
      length = collection ? collection.length : 0;

  callback = callback && typeof thisArg == 'undefined' ? callback : baseCreateCallback(callback, thisArg, 3);
  if (typeof length == 'number') {
    while (++index < length) {
      if (callback(collection[index], index, collection) === false) {
        break;
      }
    }
  } else {
    baseEach(collection, callback);
  }
  return collection;
}
""",
    "isRegExp": r"""
function isRegExp(value) {
  return value ? (typeof value == 'object' && toString.call(value) == regexpClass) : false;
}
""",
    "map": r"""
function map(collection, callback, thisArg) {
  var index = -1,
      length = collection ? collection.length : 0;

  callback = lodash.createCallback(callback, thisArg, 3);
  if (typeof length == 'number') {
    var result = Array(length);
    while (++index < length) {
      result[index] = callback(collection[index], index, collection);
    }
  } else {
    result = [];
    baseEach(collection, function(value, key, collection) {
      result[++index] = callback(value, key, collection);
    });
  }
  return result;
}
""",
    "pluck": r"""
function pluck(collection, property) {
  var index = -1,
      length = collection ? collection.length : 0;

  if (typeof length == 'number') {
    var result = Array(length);
    while (++index < length) {
      result[index] = collection[index][property];
    }
  }
  return result || map(collection, property);
}
""",
}

UNDERSCORE_BODIES = {
    "lodash": r"""
function lodash(value) {
  return (value instanceof lodash)
    ? value
    : new lodashWrapper(value);
}
""",
    "assign": r"""
function assign(object) {
  if (!object) {
    return object;
  }
  for (var argsIndex = 1, argsLength = arguments.length; argsIndex < argsLength; argsIndex++) {
    var iterable = arguments[argsIndex];
    if (iterable) {
      for (var key in iterable) {
        object[key] = iterable[key];
      }
    }
  }
  return object;
}
""",
    "clone": r"""
function clone(value) {
  return isObject(value)
    ? (isArray(value) ? slice(value) : assign({}, value))
    : value;
}
""",
    "contains": r"""
function contains(collection, target) {
  var indexOf = getIndexOf(),
      length = collection ? collection.length : 0,
      result = false;
  if (length && typeof length == 'number') {
    result = indexOf(collection, target) > -1;
  } else {
    baseEach(collection, function(value) {
      return !(result = value === target);
    });
  }
  return result;
}
""",
    "defaults": r"""
function defaults(object) {
  if (!object) {
    return object;
  }
  for (var argsIndex = 1, argsLength = arguments.length; argsIndex < argsLength; argsIndex++) {
    var iterable = arguments[argsIndex];
    if (iterable) {
      for (var key in iterable) {
        if (typeof object[key] == 'undefined') {
          object[key] = iterable[key];
        }
      }
    }
  }
  return object;
}
""",
    "difference": r"""
function difference(array) {
  var index = -1,
      indexOf = getIndexOf(),
      length = array.length,
      flattened = baseFlatten(arguments, true, true, 1),
      result = [];

  while (++index < length) {
    var value = array[index];
    if (indexOf(flattened, value) < 0) {
      result.push(value);
    }
  }
  return result;
}
""",
    "flatten": r"""
function flatten(array, isShallow) {
  return baseFlatten(array, isShallow);
}
""",
    "intersection": r"""
function intersection(array) {
  var args = arguments,
      argsLength = args.length,
      index = -1,
      indexOf = getIndexOf(),
      length = array ? array.length : 0,
      result = [];

  outer:
  while (++index < length) {
    var value = array[index];
    if (indexOf(result, value) < 0) {
      var argsIndex = argsLength;
      while (--argsIndex) {
        if (indexOf(args[argsIndex], value) < 0) {
          continue outer;
        }
      }
      result.push(value);
    }
  }
  return result;
}
""",
    "isEmpty": r"""
function isEmpty(value) {
  if (!value) {
    return true;
  }
  if (isArray(value) || isString(value)) {
    return !value.length;
  }
  for (var key in value) {
    if (hasOwnProperty.call(value, key)) {
      return false;
    }
  }
  return true;
}
""",
    "isEqual": r"""
function isEqual(a, b) {
  return baseIsEqual(a, b);
}
""",
    "baseIsEqual": r"""
function baseIsEqual(a, b, stackA, stackB) {
  if (a === b) {
    return a !== 0 || (1 / a == 1 / b);
  }
  var type = typeof a,
      otherType = typeof b;

  if (a === a &&
      !(a && objectTypes[type]) &&
      !(b && objectTypes[otherType])) {
    return false;
  }
  if (a == null || b == null) {
    return a === b;
  }
  var className = toString.call(a),
      otherClass = toString.call(b);

  if (className != otherClass) {
    return false;
  }
  switch (className) {
    case boolClass:
    case dateClass:
      return +a == +b;

    case numberClass:
      return a != +a
        ? b != +b
        : (a == 0 ? (1 / a == 1 / b) : a == +b);

    case regexpClass:
    case stringClass:
      return a == String(b);
  }
  var isArr = className == arrayClass;
  if (!isArr) {
    if (hasOwnProperty.call(a, '__wrapped__ ') || hasOwnProperty.call(b, '__wrapped__')) {
      return baseIsEqual(a.__wrapped__ || a, b.__wrapped__ || b, stackA, stackB);
    }
    if (className != objectClass) {
      return false;
    }
    var ctorA = a.constructor,
        ctorB = b.constructor;

    if (ctorA != ctorB && !(
          isFunction(ctorA) && ctorA instanceof ctorA &&
          isFunction(ctorB) && ctorB instanceof ctorB
        )) {
      return false;
    }
  }
  stackA || (stackA = []);
  stackB || (stackB = []);

  var length = stackA.length;
  while (length--) {
    if (stackA[length] == a) {
      return stackB[length] == b;
    }
  }
  var result = true,
      size = 0;

  stackA.push(a);
  stackB.push(b);

  if (isArr) {
    size = b.length;
    result = size == a.length;

    if (result) {
      while (size--) {
        if (!(result = baseIsEqual(a[size], b[size], stackA, stackB))) {
          break;
        }
      }
    }
    return result;
  }
  forIn(b, function(value, key, b) {
    if (hasOwnProperty.call(b, key)) {
      size++;
      return (result = hasOwnProperty.call(a, key) && baseIsEqual(a[key], value, stackA, stackB));
    }
  });

  if (result) {
    forIn(a, function(value, key, a) {
      if (hasOwnProperty.call(a, key)) {
        return (result = --size > -1);
      }
    });
  }
  return result;
}
""",
    "memoize": r"""
function memoize(func, resolver) {
  var cache = {};
  return function() {
    var key = keyPrefix + (resolver ? resolver.apply(this, arguments) : arguments[0]);
    return hasOwnProperty.call(cache, key)
      ? cache[key]
      : (cache[key] = func.apply(this, arguments));
  };
}
""",
    "omit": r"""
function omit(object) {
  var indexOf = getIndexOf(),
      props = baseFlatten(arguments, true, false, 1),
      result = {};

  forIn(object, function(value, key) {
    if (indexOf(props, key) < 0) {
      result[key] = value;
    }
  });
  return result;
}
""",
    "pick": r"""
function pick(object) {
  var index = -1,
      props = baseFlatten(arguments, true, false, 1),
      length = props.length,
      result = {};

  while (++index < length) {
    var prop = props[index];
    if (prop in object) {
      result[prop] = object[prop];
    }
  }
  return result;
}
""",
    "result": r"""
function result(object, property) {
  var value = object ? object[property] : undefined;
  return isFunction(value) ? object[property]() : value;
}
""",
    "sortBy": r"""
function sortBy(collection, callback, thisArg) {
  var index = -1,
      length = collection ? collection.length : 0,
      result = Array(typeof length == 'number' ? length : 0);

  callback = lodash.createCallback(callback, thisArg, 3);
  forEach(collection, function(value, key, collection) {
    result[++index] = {
      'criteria': callback(value, key, collection),
      'index': index,
      'value': value
    };
  });

  length = result.length;
  result.sort(compareAscending);
  while (length--) {
    result[length] = result[length].value;
  }
  return result;
}
""",
    "template": r"""
function template(text, data, options) {
  var _ = lodash,
      settings = _.templateSettings;

  text || (text = '');
  options = iteratorTemplate ? defaults({}, options, settings) : settings;

  var index = 0,
      source = "__p += '",
      variable = options.variable;

  var reDelimiters = RegExp(
    (options.escape || reNoMatch).source + '|' +
    (options.interpolate || reNoMatch).source + '|' +
    (options.evaluate || reNoMatch).source + '|$'
  , 'g');

  text.replace(reDelimiters, function(match, escapeValue, interpolateValue, evaluateValue, offset) {
    source += text.slice(index, offset).replace(reUnescapedString, escapeStringChar);
    if (escapeValue) {
      source += "' +\n_.escape(" + escapeValue + ") +\n'";
    }
    if (evaluateValue) {
      source += "';\n" + evaluateValue + ";\n__p += '";
    }
    if (interpolateValue) {
      source += "' +\n((__t = (" + interpolateValue + ")) == null ? '' : __t) +\n'";
    }
    index = offset + match.length;
    return match;
  });

  source += "';\n";
  if (!variable) {
    variable = 'obj';
    source = 'with (' + variable + ' || {}) {\n' + source + '\n}\n';
  }
  source = 'function(' + variable + ') {\n' +
    "var __t, __p = '', __j = Array.prototype.join;\n" +
    "function print() { __p += __j.call(arguments, '') }\n" +
    source +
    'return __p\n}';

  try {
    var result = Function('_', 'return ' + source)(_);
  } catch(e) {
    e.source = source;
    throw e;
  }
  if (data) {
    return result(data);
  }
  result.source = source;
  return result;
}
""",
    "throttle": r"""
function throttle(func, wait, options) {
  var leading = true,
      trailing = true;

  if (options === false) {
    leading = false;
  } else if (isObject(options)) {
    leading = 'leading' in options ? options.leading : leading;
    trailing = 'trailing' in options ? options.trailing : trailing;
  }
  options = {};
  options.leading = leading;
  options.maxWait = wait;
  options.trailing = trailing;

  return debounce(func, wait, options);
}
""",
    "times": r"""
function times(n, callback, thisArg) {
  var index = -1,
      result = Array(n > -1 ? n : 0);

  while (++index < n) {
    result[index] = callback.call(thisArg, index);
  }
  return result;
}
""",
    "toArray": r"""
function toArray(collection) {
  if (isArray(collection)) {
    return slice(collection);
  }
  if (collection && typeof collection.length == 'number') {
    return map(collection);
  }
  return values(collection);
}
""",
    "baseUniq": r"""
function baseUniq(array, isSorted, callback) {
  var index = -1,
      indexOf = getIndexOf(),
      length = array ? array.length : 0,
      result = [],
      seen = callback ? [] : result;

  while (++index < length) {
    var value = array[index],
        computed = callback ? callback(value, index, array) : value;

    if (isSorted
          ? !index || seen[seen.length - 1] !== computed
          : indexOf(seen, computed) < 0
        ) {
      if (callback) {
        seen.push(computed);
      }
      result.push(value);
    }
  }
  return result;
}
""",
    "uniqueId": r"""
function uniqueId(prefix) {
  var id = ++idCounter + '';
  return prefix ? prefix + id : id;
}
""",
    "where": r"""
function where(collection, properties, first) {
  return (first && isEmpty(properties))
    ? undefined
    : (first ? find : filter)(collection, properties);
}
""",
    "zip": r"""
function zip() {
  var index = -1,
      length = max(pluck(arguments, 'length')),
      result = Array(length < 0 ? 0 : length);

  while (++index < length) {
    result[index] = pluck(arguments, index);
  }
  return result;
}
""",
}

# Underscore's `findWhere`, inserted after `find`
FIND_WHERE = r"""
/**
 * Examines each element in a `collection`, returning the first that
 * has the given `properties`. When checking `properties`, this method
 * performs a deep comparison between values to determine if they are
 * equivalent to each other.
 *
 * @static
 * @memberOf _
 * @category Collections
 * @param {Array|Object|String} collection The collection to iterate over.
 * @param {Object} properties The object of property values to filter by.
 * @returns {Mixed} Returns the found element, else `undefined`.
 */
function findWhere(object, properties) {
  return where(object, properties, true);
}
"""

# Constructor left behind when wrapper chaining is removed
NOOP_LODASH = r"""
function lodash() {
  // no operation performed
}
"""
