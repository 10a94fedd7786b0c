import hashlib


def hash_leaf(data):
    return hashlib.sha256(bytes(data)).digest()


def hash_pair(a, b):
    """
    Concatenates two node digests and returns their SHA-256 hash.
    Order matters: hash_pair(a, b) != hash_pair(b, a).
    """
    return hashlib.sha256(a + b).digest()


def _next_level(level):
    next_level = []

    for i in range(0, len(level), 2):

        left = level[i]

        # duplicate last if odd
        if i + 1 < len(level):
            right = level[i+1]
        else:
            right = left

        next_level.append(hash_pair(left, right))

    return next_level


def merkle_root(leaves):
    """
    Computes the Merkle Root over an ordered list of byte-string leaves.

    Leaves are hashed first, then pairs of digests are hashed level by level
    until a single 32-byte root remains.  Leaf order is kept as given, so
    reordering the input changes the root.
    """
    level = [hash_leaf(leaf) for leaf in leaves]

    # if empty
    if not level:
        return None

    # loop until single hash
    while len(level) > 1:
        level = _next_level(level)

    return level[0]


def merkle_proof(leaves, index):
    """
    Generates a Merkle Proof for the leaf at a given index.

    Each step is (sibling_digest, sibling_is_right).  Together with the leaf
    itself this is enough to recompute the root, without the other leaves.
    """
    if not 0 <= index < len(leaves):
        raise IndexError(f"leaf index {index} out of range for {len(leaves)} leaves")

    proof = []
    level = [hash_leaf(leaf) for leaf in leaves]

    while len(level) > 1:

        if index % 2 == 0:
            pair_index = index + 1 if index + 1 < len(level) else index
            proof.append((level[pair_index], True))
        else:
            proof.append((level[index - 1], False))

        level = _next_level(level)
        index //= 2

    return proof


def root_from_proof(leaf, proof):
    """Recomputes the root from one leaf and its proof path."""
    node = hash_leaf(leaf)
    for sibling, sibling_is_right in proof:
        if sibling_is_right:
            node = hash_pair(node, sibling)
        else:
            node = hash_pair(sibling, node)
    return node


def verify_merkle_proof(leaf, proof, root):
    return root_from_proof(leaf, proof) == root
